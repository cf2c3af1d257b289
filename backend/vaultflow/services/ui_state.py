from contextlib import contextmanager


class UIState:
    """Busy and prompt-visible indicators observed by the UI layer.

    Both are reference counted so overlapping calls each restore the value
    they started from.
    """

    def __init__(self):
        self._busy = 0
        self._prompts = 0

    @property
    def busy(self) -> bool:
        return self._busy > 0

    @property
    def prompt_visible(self) -> bool:
        return self._prompts > 0

    @contextmanager
    def busy_scope(self):
        self._busy += 1
        try:
            yield
        finally:
            self._busy -= 1

    @contextmanager
    def prompt_scope(self):
        self._prompts += 1
        try:
            yield
        finally:
            self._prompts -= 1
