"""display.py — Draw render frames on a single terminal line with a tqdm progress bar."""

from tqdm import tqdm

from models import RenderFrame, StopReason

# The anchor character is always printed in this column, so the eye never moves.
FOCUS_COLUMN = 14
WORD_WIDTH = 40
ANCHOR_STYLE = "\033[1;31m"
RESET_STYLE = "\033[0m"


def layout_word(frame: RenderFrame, color: bool = True) -> str:
    """Pad the unit so its anchor sits on FOCUS_COLUMN and the line has a fixed width."""
    lead = " " * max(0, FOCUS_COLUMN - len(frame.prefix))
    trail = " " * max(0, WORD_WIDTH - len(lead) - len(frame.prefix) - 1 - len(frame.suffix))
    anchor = f"{ANCHOR_STYLE}{frame.anchor}{RESET_STYLE}" if color and frame.anchor else frame.anchor
    return f"{lead}{frame.prefix}{anchor}{frame.suffix}{trail}"


class TerminalView:
    def __init__(self, color: bool = True):
        self.color = color
        self._bar: tqdm | None = None

    def open(self, title: str, total: int) -> None:
        self.close()
        tqdm.write(f"\n{title}")
        self._bar = tqdm(
            total=total,
            bar_format="{desc} |{bar:20}| {n_fmt}/{total_fmt} {postfix}",
            dynamic_ncols=True,
        )

    def show(self, frame: RenderFrame) -> None:
        if self._bar is None:
            return
        self._bar.set_description_str(layout_word(frame, self.color), refresh=False)
        self._bar.total = frame.total
        self._bar.n = frame.position
        self._bar.refresh()

    def status(self, held: bool, reason: StopReason) -> None:
        if self._bar is None:
            return
        if held:
            self._bar.set_postfix_str("Playing (held)")
        elif reason is StopReason.END:
            self._bar.set_postfix_str("Paused (end)")
        else:
            self._bar.set_postfix_str("Paused")

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
