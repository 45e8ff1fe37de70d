# Vic Emulator: Pure-software model of the Vic teaching computer
# Part of the Vic toolchain
#
# One accumulator (data register), an instruction register, a program
# counter and 100 memory cells holding values in [-999, 999]. Every state
# transition is a pure function returning a new immutable state.

from .errors import EmulatorError, InvalidValueError, ProgramLoadError
from .cpu.decoder import (
    Add, Sub, Load, Store, Goto, GotoZ, GotoP, Read, Write, Stop, Instruction,
    decode_instruction, encode_instruction, format_instruction,
)
from .mem.memory import Memory, MEMORY_SIZE, blank_memory, initial_memory
from .streams import InputStream, OutputStream
from .machine import ExecuteResult, MachineState, StopReason, execute, fetch
from .emu import (
    CpuState, PendingFetch, PendingExecute, Stopped, HardwareState, VicEmulator,
    NUM_ITERATIONS_FOR_REAL_TIME, load_program, reload_program, resume, run,
    run_hardware, step,
)
