"""
Vic Emulator: Driver Loop

Ties together the machine state, the CPU phase and the I/O streams:

  - CpuState:       PendingFetch -> PendingExecute -> PendingFetch ... -> Stopped
  - HardwareState:  machine + CPU phase + input + output, immutable
  - step():         one fetch or one execute
  - run():          step until Stopped or until the iteration budget is spent

The iteration budget is what keeps a program that never halts from hanging
the caller. An interactive front end calls run() repeatedly with a small
budget, and simply stops calling it to cancel.

VicEmulator wraps all of this in a small mutable object for scripts and the
command line tool, in the same spirit as a hardware emulator: load a
program, feed input, run, read output.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Union

from .cpu.decoder import decode_instruction, format_instruction
from .machine import MachineState, StopReason, execute, fetch
from .mem.memory import initial_memory
from .streams import InputStream, OutputStream

log = logging.getLogger(__name__)

# Iterations that comfortably finish within one 60 FPS frame. Chosen prime
# so that a looping program shows varied snapshots between frames.
NUM_ITERATIONS_FOR_REAL_TIME = 107347


# ──────────────────────────────────────────────
# CPU phase
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class PendingFetch:
    pass


@dataclass(frozen=True)
class PendingExecute:
    pass


@dataclass(frozen=True)
class Stopped:
    reason: StopReason


CpuState = Union[PendingFetch, PendingExecute, Stopped]


def initial_cpu_state() -> CpuState:
    return PendingFetch()


@dataclass(frozen=True)
class HardwareState:
    machine: MachineState = field(default_factory=MachineState)
    cpu_state: CpuState = field(default_factory=initial_cpu_state)
    input: InputStream = field(default_factory=InputStream)
    output: OutputStream = field(default_factory=OutputStream)

    @property
    def stopped(self) -> bool:
        return isinstance(self.cpu_state, Stopped)

    @property
    def stop_reason(self) -> Optional[StopReason]:
        if isinstance(self.cpu_state, Stopped):
            return self.cpu_state.reason
        return None


# ──────────────────────────────────────────────
# Loading
# ──────────────────────────────────────────────

def load_program(program: Iterable[int], input_values: Iterable[int] = ()) -> HardwareState:
    """Fresh hardware with ``program`` in memory and the given input queued.

    Raises ProgramLoadError if the program has more than 98 values or a value
    outside [-999, 999].
    """
    memory = initial_memory().with_program(program)
    return HardwareState(
        machine=MachineState(memory=memory),
        input=InputStream.of(input_values),
    )


def reload_program(hw: HardwareState, program: Iterable[int]) -> HardwareState:
    """Load a new program, keeping the input values but rewinding them."""
    memory = initial_memory().with_program(program)
    return HardwareState(
        machine=MachineState(memory=memory),
        input=hw.input.rewind(),
    )


# ──────────────────────────────────────────────
# Execution
# ──────────────────────────────────────────────

def do_fetch(hw: HardwareState) -> HardwareState:
    return replace(hw, machine=fetch(hw.machine), cpu_state=PendingExecute())


def do_execute(hw: HardwareState) -> HardwareState:
    result = execute(hw.machine, hw.input.next_value())
    if result.stop_reason is not None:
        log.debug("stopped: %s at PC=%d", result.stop_reason.value, result.state.program_counter)
        cpu_state: CpuState = Stopped(result.stop_reason)
    else:
        cpu_state = PendingFetch()
    return HardwareState(
        machine=result.state,
        cpu_state=cpu_state,
        input=hw.input.consume() if result.consumed_input else hw.input,
        output=hw.output.append(result.output) if result.output is not None else hw.output,
    )


def step(hw: HardwareState) -> HardwareState:
    """Perform one fetch or one execute, depending on the CPU phase."""
    if isinstance(hw.cpu_state, Stopped):
        return hw
    if isinstance(hw.cpu_state, PendingFetch):
        return do_fetch(hw)
    if isinstance(hw.cpu_state, PendingExecute):
        return do_execute(hw)
    raise AssertionError(f"unreachable cpu state: {hw.cpu_state!r}")


def run_hardware(hw: HardwareState, max_iterations: int) -> HardwareState:
    """Step up to ``max_iterations`` times, stopping early once Stopped."""
    for _ in range(max_iterations):
        if isinstance(hw.cpu_state, Stopped):
            break
        hw = step(hw)
    return hw


def run(state: MachineState, cpu_state: CpuState, input: InputStream,
        output: OutputStream, max_iterations: int) -> HardwareState:
    """Run the driver loop on loose components; see run_hardware()."""
    return run_hardware(HardwareState(state, cpu_state, input, output), max_iterations)


def resume(hw: HardwareState) -> HardwareState:
    """Clear a NO_INPUT stop so the pending READ is retried on the next run."""
    if hw.stop_reason is StopReason.NO_INPUT:
        return replace(hw, cpu_state=PendingExecute())
    return hw


# ──────────────────────────────────────────────
# Convenience wrapper
# ──────────────────────────────────────────────

class VicEmulator:
    """Vic computer emulator.

    Usage:
        emu = VicEmulator()
        emu.load([800, 900, 0], input_values=[42])
        reason = emu.run()
        print(emu.output)        # [42]
    """

    DEFAULT_MAX_ITERATIONS = NUM_ITERATIONS_FOR_REAL_TIME

    def __init__(self, trace: bool = False):
        self.hw = HardwareState()
        self._trace = trace
        self.trace_output: List[str] = []

    def load(self, program: Iterable[int], input_values: Iterable[int] = ()):
        self.hw = load_program(program, input_values)
        self.trace_output = []

    def feed(self, *values: int):
        """Append input values, and retry a READ that ran out of input."""
        self.hw = resume(replace(self.hw, input=self.hw.input.append(*values)))

    def step(self) -> Optional[StopReason]:
        """Run one full instruction (fetch + execute)."""
        if isinstance(self.hw.cpu_state, PendingFetch):
            self.hw = do_fetch(self.hw)
        if isinstance(self.hw.cpu_state, PendingExecute):
            if self._trace:
                m = self.hw.machine
                instr = decode_instruction(m.instruction_register)
                self.trace_output.append(
                    f"{m.program_counter:02d}: {format_instruction(instr):8s} {m.display()}")
            self.hw = do_execute(self.hw)
        return self.hw.stop_reason

    def run(self, max_iterations: Optional[int] = None) -> Optional[StopReason]:
        """Run until stopped or the budget is spent. Returns the stop reason,
        or None if the program was still running."""
        if max_iterations is None:
            max_iterations = self.DEFAULT_MAX_ITERATIONS
        if self._trace:
            # Two iterations per instruction
            for _ in range(max(0, max_iterations) // 2):
                if self.step() is not None:
                    break
        else:
            self.hw = run_hardware(self.hw, max_iterations)
        return self.hw.stop_reason

    @property
    def machine(self) -> MachineState:
        return self.hw.machine

    @property
    def output(self) -> List[int]:
        return list(self.hw.output.values)
