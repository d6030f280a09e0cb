from enum import Enum

from agent_sync.models import ActionStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


ACTION_STATUS_STYLE = {
    ActionStatus.CREATE: UIStyle.GREEN.value,
    ActionStatus.UPDATE: UIStyle.CYAN.value,
    ActionStatus.REMOVE: UIStyle.MAGENTA.value,
    ActionStatus.NOOP: UIStyle.DIM.value,
}

RESULT_BUCKET_STYLE = {
    "created": ACTION_STATUS_STYLE[ActionStatus.CREATE],
    "updated": ACTION_STATUS_STYLE[ActionStatus.UPDATE],
    "deleted": ACTION_STATUS_STYLE[ActionStatus.REMOVE],
    "unchanged": ACTION_STATUS_STYLE[ActionStatus.NOOP],
}
