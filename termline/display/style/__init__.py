# display/style/__init__.py

from .definitions import StyleDefinitions, RowStyle
from .engine import StyleEngine as BaseStyleEngine

class DisplayStyle:
    """
    Primary style coordination layer that wraps around terminal operations.

    Component Hierarchy:
    DisplayStyle → BaseStyleEngine → StyleDefinitions → Terminal
    """
    def __init__(self, terminal):
        """
        Initialize the style system with terminal dependency.

        Args:
            terminal: DisplayTerminal instance for base terminal operations
        """
        self.definitions = StyleDefinitions()
        self._engine = BaseStyleEngine(
            definitions=self.definitions,
            terminal=terminal
        )

    def __getattr__(self, name):
        """Delegate unknown attribute access to the style engine instance."""
        return getattr(self._engine, name)

# Export the main interface
__all__ = ['DisplayStyle', 'StyleDefinitions', 'RowStyle']
