"""input_signal.py — Turn level-style press/repeat/release events into engage/disengage edges."""

from models import StopReason
from session import ReadingSession


class HoldSignal:
    """
    Dead-man switch for one physical control (a key or a touch point).
    Auto-repeat "still pressed" events arrive as further press() calls and are
    ignored until a real release, so reaching the end of a chapter while the key
    is held does not restart playback.
    """

    def __init__(self, session: ReadingSession):
        self.session = session
        self.down = False

    def press(self) -> bool:
        if self.down:
            return False
        self.down = True
        return self.session.engage()

    def release(self) -> None:
        self.down = False
        if self.session.held:
            self.session.disengage(StopReason.RELEASE)

    # Pointer cancel / leave behave like a release.
    cancel = release
