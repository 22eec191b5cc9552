
DEFAULT_FUNCTION_COLOR = '<fg #457b9d>'
DEFAULT_CLASS_COLOR = '<fg #219ebc>'

LOGLEVEL_MAPPING = {
    50: 'CRITICAL',
    40: 'ERROR',
    30: 'WARNING',
    25: 'SUCCESS',
    20: 'INFO',
    10: 'DEBUG',
    5: 'TRACE',
    0: 'NOTSET',
}

REVERSE_LOGLEVEL_MAPPING = {v: k for k, v in LOGLEVEL_MAPPING.items()}
