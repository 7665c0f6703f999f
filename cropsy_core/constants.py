"""Core constants shared across configuration helpers."""

WIDTH_QUANTUM = 16
HEIGHT_QUANTUM = 9
OSC_FLOAT_DECIMALS = 6
DEFAULT_LAYOUT_SETTINGS = {
    'top_margin': 47,
    'bottom_margin': 60,
    'left_margin': 6,
    'right_margin': 6,
    'spacing': 6,
    'aspect_ratio': 16 / 9,
    'inset': 1,
}
DEFAULT_RELAY_SETTINGS = {
    'listen_host': '0.0.0.0',
    'listen_port': 1235,
    'target_host': '127.0.0.1',
    'target_port': 1234,
    'command_address': '/zgc/cropValues',
    'output_address': '/izzy/cropValues',
}
RELAY_ENV_OVERRIDES = {
    'LISTEN_HOST': 'listen_host',
    'LISTEN_PORT': 'listen_port',
    'IZZY_HOST': 'target_host',
    'IZZY_PORT': 'target_port',
}
DEFAULT_RUNTIME_PATHS = {
    'out_dir': 'output',
}
