"""
Default settings for the scheduling engine and the chart renderer.

Every value here can be overridden where it is used, either through a
keyword argument (``Project(generic_resource_output=...)``) or through the
matching command line flag.
"""

# Effort units one full-time resource delivers per working day
GENERIC_RESOURCE_OUTPUT = 8.0

# datetime.date.weekday() values that never accrue work (Saturday, Sunday)
WEEKEND_DAYS = (5, 6)

# Number of days covered by the resource load chart
LOAD_CHART_DAYS = 365

# Number of quarter boundaries drawn on the charts
CHART_QUARTERS = 4

DEFAULT_GANTT_FILE = "gantt.svg"
DEFAULT_LOAD_CHART_FILE = "load_chart.svg"
