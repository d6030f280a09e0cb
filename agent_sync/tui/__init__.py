from agent_sync.tui.renderers import SyncConsoleUI

__all__ = ["SyncConsoleUI"]
