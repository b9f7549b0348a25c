from typing import Optional

from rich.markup import escape
from rich.status import Status

from lengthen_cli.controller import START_LABEL
from lengthen_cli.display import console, error_panel, ok_panel
from lengthen_cli.utils import SubmissionParams


class TerminalForm:
    """
    The terminal stand-in for the submit page: three input fields, an output
    field, a busy indicator and a submit label.

    With ``render`` off the form only records state, and the caller decides
    what to print.
    """

    def __init__(self, render: bool = True):
        self.render = render
        self.url = ""
        self.delay = ""
        self.duration = ""
        self.output = ""
        self.busy = False
        self.submit_label = START_LABEL
        self.alerts = []
        self.alert_details = []
        self._status: Optional[Status] = None

    def fill(self, url: str, delay: str = "", duration: str = ""):
        self.url, self.delay, self.duration = url, delay, duration

    # ========== UiSink ==========
    def read_params(self) -> SubmissionParams:
        return SubmissionParams(url=self.url, delay=self.delay, duration=self.duration)

    def set_output(self, value: str):
        self.output = value
        if value and self.render:
            ok_panel("Lengthened", value)

    def set_busy(self, busy: bool):
        self.busy = busy
        if not self.render:
            return
        if busy and self._status is None:
            self._status = console.status(f"[info]Requesting[/info] {escape(self.url)} ...")
            self._status.start()
        elif not busy and self._status is not None:
            self._status.stop()
            self._status = None

    def set_submit_label(self, label: str):
        self.submit_label = label

    def alert(self, message: str, detail: Optional[str] = None):
        self.alerts.append(message)
        self.alert_details.append(detail)
        if self.render:
            error_panel(f"Request failed: {detail}" if detail else "Request failed !", message)
