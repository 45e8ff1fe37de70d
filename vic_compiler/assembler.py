"""
Vic Assembler.

Turns the statement list produced by the parser into a numeric program: a
list of values in [-999, 999] that can be loaded directly into memory
addresses 0..n-1.

Input:  List[Statement] (from parser.parse_statements)
Output: Ok(List[int]) when no diagnostics were produced, else Err(List[SrcError])

Instruction encoding:
    READ  800        ADD   1xx        GOTO   5xx
    WRITE 900        SUB   2xx        GOTOZ  6xx
    STOP  000        LOAD  3xx        GOTOP  7xx
                     STORE 4xx
  where xx is a variable address (ADD..STORE) or a label address (GOTO*).

How the passes work:
  Pass 1: Count instructions. Code lives at 0..89, so more than 90
          instructions is an error (reported once, at the 91st).
  Pass 2: Resolve labels. Each label gets the address of the instruction
          that follows it. Forward and backward references both work.
  Pass 3: Allocate variables. A variable is created by the first STORE that
          names it. Slots run 90..97, then 89 downwards. Addresses 98 and 99
          hold the built-in "zero" and "one".
  Emit:   Walk the statements again and encode each instruction.

Every pass is a pure fold over the statement list and can be run on its
own; the Assembler class only strings them together.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .diagnostics import Err, Ok, Result, SrcError, SrcLoc
from .statements import (
    Arg, Label, NullaryInstruction, NullaryOp, Statement, UnaryInstruction,
    UnaryOp, is_instruction,
)

__all__ = [
    'Assembler', 'assemble', 'count_instructions', 'process_labels',
    'process_variables', 'first_variable_slot', 'next_variable_slot',
    'MAX_INSTRUCTIONS', 'MEMORY_SIZE', 'BUILTIN_VARIABLES',
]

log = logging.getLogger(__name__)

MEMORY_SIZE = 100

# Maximum number of instructions that fit below the variable area.
MAX_INSTRUCTIONS = 90

# Built-in variables, pre-loaded into the top two memory cells.
BUILTIN_VARIABLES: Dict[str, int] = {
    "zero": 98,
    "one": 99,
}

NULLARY_CODES: Dict[NullaryOp, int] = {
    NullaryOp.READ: 800,
    NullaryOp.WRITE: 900,
    NullaryOp.STOP: 0,
}

VARIABLE_OPCODES: Dict[UnaryOp, int] = {
    UnaryOp.ADD: 100,
    UnaryOp.SUB: 200,
    UnaryOp.LOAD: 300,
    UnaryOp.STORE: 400,
}

LABEL_OPCODES: Dict[UnaryOp, int] = {
    UnaryOp.GOTO: 500,
    UnaryOp.GOTOZ: 600,
    UnaryOp.GOTOP: 700,
}


# ──────────────────────────────────────────────
# Pass 1: instruction count
# ──────────────────────────────────────────────

@dataclass
class CountResult:
    num_instructions: int
    error: Optional[SrcError] = None


def _instruction_extent(statement: Statement) -> SrcLoc:
    """Span of an instruction including its argument, if it has one."""
    if isinstance(statement, UnaryInstruction) and statement.arg is not None:
        loc = statement.src_loc
        return SrcLoc(loc.line, loc.start_col, statement.arg.src_loc.end_col)
    return statement.src_loc


def count_instructions(statements: List[Statement]) -> CountResult:
    result = CountResult(0)
    for statement in statements:
        if not is_instruction(statement):
            continue
        result.num_instructions += 1
        if result.error is None and result.num_instructions > MAX_INSTRUCTIONS:
            result.error = SrcError(_instruction_extent(statement), "Too many instructions")
    return result


# ──────────────────────────────────────────────
# Pass 2: labels
# ──────────────────────────────────────────────

@dataclass
class LabelsResult:
    labels: Dict[str, int] = field(default_factory=dict)     # lowercased name -> address
    errors: List[SrcError] = field(default_factory=list)


def process_labels(statements: List[Statement]) -> LabelsResult:
    result = LabelsResult()
    address = 0
    for statement in statements:
        if isinstance(statement, Label):
            name = statement.name.lower()
            if name in result.labels:
                result.errors.append(
                    SrcError(statement.src_loc, f'Duplicate label "{statement.name}"'))
            else:
                result.labels[name] = address
        else:
            address += 1
    return result


# ──────────────────────────────────────────────
# Pass 3: variables
# ──────────────────────────────────────────────

def first_variable_slot() -> int:
    """Variables are allocated starting at memory address 90."""
    return 90


def next_variable_slot(slot: int) -> int:
    """The slot after ``slot`` in allocation order.

    90..97 fill upwards (98 and 99 hold the built-ins), then allocation
    continues at 89 and goes down. Once it reaches 0 it stays there; the
    capacity check reports the overflow long before that matters.
    """
    if 90 <= slot <= 96:
        return slot + 1
    if slot == 97:
        return 89
    if slot > 1:
        return slot - 1
    return 0


@dataclass
class VariablesResult:
    variables: Dict[str, int] = field(default_factory=lambda: dict(BUILTIN_VARIABLES))
    error: Optional[SrcError] = None


def process_variables(statements: List[Statement], max_num_variables: int) -> VariablesResult:
    """Allocate a slot to every variable on its first STORE.

    The capacity check counts the built-in variables too, since they share
    the same 100 memory cells with the code.
    """
    result = VariablesResult()
    slot = first_variable_slot()

    for statement in statements:
        if not (isinstance(statement, UnaryInstruction)
                and statement.op is UnaryOp.STORE and statement.arg is not None):
            continue
        name = statement.arg.name.lower()
        if name in result.variables:
            continue
        result.variables[name] = slot
        log.debug("variable %r -> %d", statement.arg.name, slot)
        slot = next_variable_slot(slot)
        if result.error is None and len(result.variables) > max_num_variables:
            result.error = SrcError(statement.arg.src_loc, "Too many variables")

    return result


# ──────────────────────────────────────────────
# The Assembler
# ──────────────────────────────────────────────

class Assembler:
    """Three-pass Vic assembler.

    Usage:
        asm = Assembler()
        result = asm.assemble(statements)
        if result.is_ok():
            print(asm.get_listing())
    """

    def __init__(self):
        self.labels: Dict[str, int] = {}
        self.variables: Dict[str, int] = {}
        self.num_instructions: int = 0
        self.errors: List[SrcError] = []
        self.program: List[int] = []
        # (address, code, statement) for every emitted instruction
        self._emitted: List[Tuple[int, int, Statement]] = []
        self._statements: List[Statement] = []

    def assemble(self, statements: List[Statement]) -> Result[List[SrcError], List[int]]:
        self._statements = list(statements)
        self.errors = []
        self.program = []
        self._emitted = []

        counted = count_instructions(self._statements)
        self.num_instructions = counted.num_instructions
        if counted.error is not None:
            self.errors.append(counted.error)

        labels = process_labels(self._statements)
        self.labels = labels.labels
        self.errors.extend(labels.errors)

        # Code and variables share the 100 memory cells.
        variables = process_variables(self._statements, MEMORY_SIZE - self.num_instructions)
        self.variables = variables.variables
        if variables.error is not None:
            self.errors.append(variables.error)

        for statement in self._statements:
            self._emit_statement(statement)

        log.debug("assembled %d instructions, %d variables, %d errors",
                  self.num_instructions, len(self.variables) - len(BUILTIN_VARIABLES),
                  len(self.errors))

        if self.errors:
            return Err(list(self.errors))
        return Ok(list(self.program))

    def _emit_statement(self, statement: Statement):
        if isinstance(statement, Label):
            return
        if isinstance(statement, NullaryInstruction):
            self._emit(NULLARY_CODES[statement.op], statement)
            return
        if isinstance(statement, UnaryInstruction):
            if statement.op in VARIABLE_OPCODES:
                self._emit_ref(VARIABLE_OPCODES[statement.op], statement,
                               self.variables, "variable")
            else:
                self._emit_ref(LABEL_OPCODES[statement.op], statement,
                               self.labels, "label")
            return
        raise AssertionError(f"unreachable statement: {statement!r}")

    def _emit_ref(self, opcode: int, statement: UnaryInstruction,
                  table: Dict[str, int], kind: str):
        arg: Optional[Arg] = statement.arg
        if arg is None:
            # Missing or malformed argument; the parser already reported it.
            return
        addr = table.get(arg.name.lower())
        if addr is None:
            self.errors.append(SrcError(arg.src_loc, f'No such {kind} "{arg.name}"'))
            return
        self._emit(opcode + addr, statement)

    def _emit(self, code: int, statement: Statement):
        self._emitted.append((len(self.program), code, statement))
        self.program.append(code)

    def get_listing(self) -> str:
        """Return a human-readable listing showing address, code, and source."""
        lines = [f"{'ADDR':>4}  {'CODE':>4}  SOURCE", "-" * 40]
        emitted = iter(self._emitted)
        current = next(emitted, None)
        for statement in self._statements:
            if isinstance(statement, Label):
                lines.append(f"{'':4}  {'':4}  {statement.name}:")
                continue
            if current is not None and current[2] is statement:
                addr, code, _ = current
                lines.append(f"{addr:>4}  {code:04d}  {_statement_text(statement)}")
                current = next(emitted, None)
            else:
                lines.append(f"{'':4}  {'????':>4}  {_statement_text(statement)}")
        return "\n".join(lines)


def _statement_text(statement: Statement) -> str:
    if isinstance(statement, UnaryInstruction):
        arg = statement.arg.name if statement.arg is not None else ""
        return f"    {statement.op.value.lower()} {arg}".rstrip()
    if isinstance(statement, NullaryInstruction):
        return f"    {statement.op.value.lower()}"
    return f"{statement.name}:"


# ──────────────────────────────────────────────
# Convenience functions
# ──────────────────────────────────────────────

def assemble(statements: List[Statement]) -> Result[List[SrcError], List[int]]:
    """Assemble a statement list into a numeric program."""
    return Assembler().assemble(statements)
