"""
stackvm — Machine / Runtime Configuration
==========================================

Fixed machine parameters and runtime defaults. Everything here is a plain
module constant; callers override per-run values through function arguments
(e.g. ``StackVM.run(max_steps=...)``), not by editing this file.
"""

# =============================================================================
#  MACHINE GEOMETRY
# =============================================================================
STACK_SIZE = 128          # byte stack capacity
BYTE_MASK = 0xFF          # all stack values are unsigned 8-bit


# =============================================================================
#  EXECUTION
# =============================================================================
# None = run until Halt or fault (no termination guarantee)
DEFAULT_MAX_STEPS = None


# =============================================================================
#  TRACE / DEBUG OUTPUT
# =============================================================================
TRACE_ROW_WIDTH = 32      # bytes per hex row in the stack dump


# =============================================================================
#  LOGGING
# =============================================================================
LOG_NAME = "stackvm"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
