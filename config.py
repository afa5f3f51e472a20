import json, logging, pathlib
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

log = logging.getLogger(__name__)


class Settings(BaseModel):
    serial_baudrate: int = 115200
    serial_write_timeout_s: float = Field(0.005, gt=0.0)
    dispatch_interval_ms: float = Field(5.0, ge=5.0)
    frame_interval_ms: int = 1
    gamepad_deadzone: float = Field(0.1, ge=0.0, lt=1.0)
    gamepad_trigger_rescale: bool = True
    gamepad_axis_map: dict[str, int] = {
        "left_x": 0,
        "left_y": 1,
        "right_x": 2,
        "right_y": 3,
        "trigger_left": 4,
        "trigger_right": 5,
    }
    gamepad_button_map: dict[str, int] = {
        "a": 0,
        "b": 1,
        "x": 2,
        "y": 3,
        "left_shoulder": 4,
        "right_shoulder": 5,
        "back": 6,
        "start": 7,
    }
    motor_mix: Optional[List[List[float]]] = None
    sampler_capacity: int = Field(4, ge=0)
    sampler_pulse_s: float = 0.5
    response_history: int = Field(50, ge=0)
    logging_max_lines: int = 500
    log_file_path: str = "rov_teleop.log"
    log_json_path: str = "log.json"
    window_size: tuple[int, int] = (800, 600)

    @field_validator("motor_mix")
    @classmethod
    def _check_motor_mix(cls, mix):
        if mix is None:
            return mix
        if len(mix) != 6 or any(len(weights) != 5 for weights in mix):
            raise ValueError("motor_mix needs 6 rows of 5 weights")
        return mix


def load_config(path="config.json") -> Settings:
    config_path = pathlib.Path(path)
    if not config_path.exists():
        log.info(f"No config file at {path}, using defaults")
        return Settings()
    raw = json.loads(config_path.read_text())
    return Settings(**raw)
