LOGGER_NAME = 'adfconvert'
"""Package logger name identifier."""

LOG_FILE_FILE_NAME = 'adfconvert.log'
"""Default log file name."""

CONFIG_FILE_FILE_NAME = 'config.yaml'
"""Default configuration file name."""

ADF_DOCUMENT_VERSION = 1
"""The ADF document version emitted by the builder."""

DEFAULT_STATUS_COLOR = 'neutral'
"""The color assigned to status lozenges that do not declare one."""

DEFAULT_PANEL_TYPE = 'info'
"""The panel type assigned to panels that do not declare one."""

DECISION_STATE = 'DECIDED'
"""The only state a decision item can be in."""

TASK_LIST_TAG = 'task-list'
"""Value of `data-tag` on `<adf-local-data>` announcing that the next list is a task list."""

DECISION_LIST_TAG = 'decision-list'
"""Value of `data-tag` on `<adf-local-data>` announcing that the next list is a decision list."""

MARKDOWN_TASK_LIST_CLASS = 'contains-task-list'
"""CSS class the markdown task list plugin sets on lists holding checkboxes."""

CODE_LANGUAGE_CLASS_PREFIX = 'language-'
"""Prefix of the CSS class carrying a code block language."""

TEXT_COLORS = {
    '#0747a6': 'bold_blue',
    '#008da6': 'bold_teal',
    '#006644': 'bold_green',
    '#ff991f': 'bold_orange',
    '#bf2600': 'bold_red',
    '#403294': 'bold_purple',
    '#97a0af': 'gray',
    '#4c9aff': 'blue',
    '#00b8d9': 'teal',
    '#36b37e': 'green',
    '#ffc400': 'yellow',
    '#ff5630': 'red',
    '#6554c0': 'purple',
    '#ffffff': 'white',
    '#b3d4ff': 'subtle_blue',
    '#b3f5ff': 'subtle_teal',
    '#abf5d1': 'subtle_green',
    '#fff0b3': 'subtle_yellow',
    '#ffbdad': 'subtle_red',
    '#eae6ff': 'subtle_purple',
}
"""Text colors supported by the ADF color palette, keyed by lowercase hex value."""

ALERT_TO_PANEL_TYPE = {
    'NOTE': 'info',
    'TIP': 'success',
    'IMPORTANT': 'note',
    'WARNING': 'warning',
    'CAUTION': 'error',
}
"""Markdown alert markers and the ADF panel type each one maps to."""

PANEL_TYPE_TO_ALERT = {value: key for key, value in ALERT_TO_PANEL_TYPE.items()}
"""ADF panel types and the markdown alert marker used to render them."""

PARAGRAPH_HOISTED_TAGS = frozenset({'details', 'summary', 'table', 'adf-media-group'})
"""Block elements that may not stay nested in a paragraph."""

SANITIZER_REMOVED_TAGS = ('script', 'style', 'head')
"""Elements removed from the HTML together with their content before conversion."""
