"""Units and display constants."""

# Unit conversions
MS_PER_SECOND = 1000.0

# Number of frames simulated per run (the window shown on the timeline)
DEFAULT_FRAME_COUNT = 6

# Minimum number of frames needed to measure an inter-present interval
MIN_FRAMES_FOR_METRICS = 2

# Timeline axis aims for this many ticks
TARGET_TICKS = 8

# Multipliers of the power-of-ten magnitude tried for the tick interval
TICK_MULTIPLIERS = (1, 2, 5, 10)

# Parameters that can be swept from the CLI
SWEEPABLE_PARAMETERS = (
    "script_time",
    "command_count",
    "generation_factor",
    "processing_factor",
    "buffer_capacity",
    "max_frames_ahead",
)
