from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class JobPhase(str, Enum):
    PENDING = "pending"
    WAITING = "waiting"
    RUNNING = "running"
    TERMINATED = "terminated"


class RepeatUnit(str, Enum):
    HOURS = "h"
    MINUTES = "m"
    SECONDS = "s"


class JobConfig(BaseModel):
    """
    Model representing the configuration a job is started with.

    Attributes:
        start_time: Time of day the job starts ticking, "HH:MM:SS" or "HH:MM".
        repeat_value: Number of repeat units between two requests.
        repeat_unit: One of "h", "m", "s". Checked when the job leaves its wait.
        api_url: Target URL of the request.
        http_method: "POST" sends a form body, anything else sends a GET.
        payload: JSON object of string to string, kept as the raw blob.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start_time: str = Field(alias="startTime")
    repeat_value: int = Field(alias="repeatValue")
    repeat_unit: str = Field(alias="repeatUnit")
    api_url: str = Field(alias="apiURL")
    http_method: str = Field(default="GET", alias="httpMethod")
    payload: str = Field(default="")


class StartRequest(JobConfig):
    """Body of a start request: a job config plus the job identifier."""

    id: str


class StopRequest(BaseModel):
    id: str


class LogEntry(BaseModel):
    """
    Model representing a single diagnostic line.

    Attributes:
        time: Local wall-clock time the entry was recorded, "HH:MM:SS".
        message: Human readable status line.
    """

    time: str
    message: str

    @classmethod
    def now(cls, message: str) -> "LogEntry":
        return cls(time=datetime.now().strftime("%H:%M:%S"), message=message)
