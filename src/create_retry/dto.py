from __future__ import annotations

from datetime import datetime
from urllib.parse import quote

from pydantic import BaseModel, Field

# Status bar colors
COLOR_COUNTING = "#00688c"
COLOR_CLICKED = "#44bd50"
COLOR_NOT_FOUND = "#ff4d4d"
COLOR_SUCCESS = "#00ff00"

INSTANCES_URL = "https://cloud.oracle.com/compute/instances"


class StatusUpdate(BaseModel):
    text: str = Field(..., description="Text shown in the status bar")
    color: str = Field(COLOR_COUNTING, description="CSS background color")
    bold: bool = Field(False, description="Render the text in bold")

    @classmethod
    def counting(cls, seconds: int) -> StatusUpdate:
        return cls(text=f"Clicking in {seconds} seconds", color=COLOR_COUNTING)

    @classmethod
    def clicked(cls) -> StatusUpdate:
        return cls(text="Create clicked!", color=COLOR_CLICKED)

    @classmethod
    def not_found(cls) -> StatusUpdate:
        return cls(text="Create button not found!", color=COLOR_NOT_FOUND)

    @classmethod
    def created(cls) -> StatusUpdate:
        return cls(text="Instance created! Script stopped.", color=COLOR_SUCCESS, bold=True)


class SuccessNotification(BaseModel):
    subject: str = "Oracle Instance Created Successfully!"
    recipient: str = ""
    detail: str = Field("", description="Success text matched on the console page")
    console_url: str = INSTANCES_URL
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def body(self) -> str:
        lines = [
            "Good news! Your Oracle Cloud instance has been created successfully!",
            "",
            "The script has stopped automatically.",
        ]
        if self.detail:
            lines += ["", f"Console message: {self.detail}"]
        lines += [
            "",
            "Connect to Oracle Cloud to see your new instance:",
            self.console_url,
            "",
            f"Creation time: {self.created_at:%Y-%m-%d %H:%M:%S}",
        ]
        return "\n".join(lines)

    def mailto_uri(self) -> str:
        return (
            f"mailto:{self.recipient}"
            f"?subject={quote(self.subject, safe='')}"
            f"&body={quote(self.body, safe='')}"
        )
