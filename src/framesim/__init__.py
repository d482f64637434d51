"""Frame Pipeline Timing Simulator.

Models how a CPU stage (scripts and command generation) and a GPU stage
(command execution) interact through a bounded command buffer and a
frames-ahead throttle, producing frame time, throughput and latency.
"""

__version__ = "0.1.0"
