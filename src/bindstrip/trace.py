import sys


class Trace:
    """Debug output shared by the stripping passes.

    Components only format their messages when ``env_debug`` is on, so a
    disabled trace costs a single attribute check per edit.
    """

    __slots__ = ("env_debug", "stream")

    def __init__(self, enabled=False, stream=None):
        self.env_debug = bool(enabled)
        self.stream = stream

    def debug(self, message, indent=4):
        if not self.env_debug:
            return
        print(f"{' ' * indent}{message}", file=self.stream or sys.stdout)


class Traced:
    __slots__ = ()

    def debug(self, message, indent=4):
        # Only call trace.debug if debugging is on - avoid string formatting overhead
        if self.trace.env_debug:
            class_name = self.__class__.__name__
            self.trace.debug(f"{class_name}: {message}", indent=indent)
