"""
Default parameters for simulation runs and the command-line front end.
"""

# Round-robin time quantum used when none is given.
DEFAULT_QUANTUM = 2

# Policies run by ``cpusched all``, with their report titles.
DEFAULT_BATTERY = [
    ("fcfs", "First-come, first-serve"),
    ("sjf", "Shortest-job-first"),
    ("sjf-priority", "SJFPrioritySchedule"),
    ("rr", "Round-robin"),
]

# Policies that take a quantum.
QUANTUM_ALGORITHMS = {"rr"}

LOGGING = {
    "level": "WARNING",
    "format": "%(message)s",
    "datefmt": "[%X]",
}

# Width of one cell in the plain-text Gantt chart.
GANTT_CELL_WIDTH = 8
