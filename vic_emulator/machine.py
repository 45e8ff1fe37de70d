"""
Vic Emulator: Machine State and Instruction Semantics

MachineState is an immutable snapshot of the CPU registers and memory.
fetch() and execute() are pure: they return a new state and never modify
the one they were given.

Execution model (one instruction = two steps):
  1. fetch:   IR := memory[PC]            (PC unchanged)
  2. execute: decode IR, apply it, move PC on

Termination reasons:
  - STOP:     a STOP instruction was executed (PC stays on it)
  - NO_INPUT: READ with an exhausted input stream; nothing changes, so the
              same READ can be retried once more input is available
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field, replace
from typing import Optional

from .cpu import alu
from .cpu.decoder import (
    Add, Goto, GotoP, GotoZ, Instruction, Load, Read, Stop, Store, Sub, Write,
    decode_instruction,
)
from .mem.memory import MEMORY_SIZE, Memory, initial_memory


class StopReason(enum.Enum):
    STOP = 'STOP'
    NO_INPUT = 'NO_INPUT'


@dataclass(frozen=True)
class MachineState:
    instruction_register: int = 0
    data_register: int = 0
    program_counter: int = 0
    memory: Memory = field(default_factory=initial_memory)

    def display(self) -> str:
        return (f"IR={self.instruction_register:4d} DR={self.data_register:4d} "
                f"PC={self.program_counter:3d}")


@dataclass(frozen=True)
class ExecuteResult:
    state: MachineState
    consumed_input: bool = False
    output: Optional[int] = None
    stop_reason: Optional[StopReason] = None


def fetch(state: MachineState) -> MachineState:
    """Load memory[PC] into the instruction register.

    A PC that has run off the end of memory fetches 0, which decodes to STOP.
    """
    pc = state.program_counter
    value = state.memory.read(pc) if 0 <= pc < MEMORY_SIZE else 0
    return replace(state, instruction_register=value)


def execute(state: MachineState, next_input: Optional[int]) -> ExecuteResult:
    """Decode and execute the instruction register.

    ``next_input`` is the value a READ would consume, or None if the input
    stream is exhausted.
    """
    return execute_instruction(state, decode_instruction(state.instruction_register), next_input)


def execute_instruction(state: MachineState, instr: Instruction,
                        next_input: Optional[int]) -> ExecuteResult:
    pc = state.program_counter
    dr = state.data_register

    if isinstance(instr, Add):
        return ExecuteResult(replace(state, data_register=alu.add(dr, state.memory.read(instr.address)),
                                     program_counter=pc + 1))
    if isinstance(instr, Sub):
        return ExecuteResult(replace(state, data_register=alu.sub(dr, state.memory.read(instr.address)),
                                     program_counter=pc + 1))
    if isinstance(instr, Load):
        return ExecuteResult(replace(state, data_register=state.memory.read(instr.address),
                                     program_counter=pc + 1))
    if isinstance(instr, Store):
        return ExecuteResult(replace(state, memory=state.memory.write(instr.address, dr),
                                     program_counter=pc + 1))
    if isinstance(instr, Goto):
        return ExecuteResult(replace(state, program_counter=instr.address))
    if isinstance(instr, GotoZ):
        target = instr.address if dr == 0 else pc + 1
        return ExecuteResult(replace(state, program_counter=target))
    if isinstance(instr, GotoP):
        target = instr.address if dr > 0 else pc + 1
        return ExecuteResult(replace(state, program_counter=target))
    if isinstance(instr, Read):
        if next_input is None:
            return ExecuteResult(state, stop_reason=StopReason.NO_INPUT)
        return ExecuteResult(replace(state, data_register=next_input, program_counter=pc + 1),
                             consumed_input=True)
    if isinstance(instr, Write):
        return ExecuteResult(replace(state, program_counter=pc + 1), output=dr)
    if isinstance(instr, Stop):
        return ExecuteResult(state, stop_reason=StopReason.STOP)
    raise AssertionError(f"unreachable instruction: {instr!r}")
