"""Smart Set: film production breakdown and stripboard scheduling.

Screenplays are broken down into scenes and production elements by an LLM,
then organized into stripboards (day by day shooting schedules) and a
production calendar.
"""

__version__ = "0.1.0"
