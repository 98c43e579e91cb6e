ROLE_VALUES = [
    'super_admin',
    'admin',
    'candidate',
]

ASSIGNMENT_STATE_VALUES = ['assigned', 'started', 'finished', 'superseded']
LIVE_ASSIGNMENT_STATES = ('assigned', 'started')

# A state may only move along these edges.
ASSIGNMENT_TRANSITIONS = {
    'assigned': {'started', 'superseded'},
    'started': {'finished', 'superseded'},
    'finished': set(),
    'superseded': set(),
}

DATE_FILTER_VALUES = ['All', 'Today', 'Yesterday', 'MonthTillDate', 'DateRange']

DEFAULT_SUBJECTS = ['JavaScript', 'Embedded']
DEFAULT_POSITIONS = ['JavaScript Developer', 'Embedded Developer']
