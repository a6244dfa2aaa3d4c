# dog_sync/utils/logger.py
import os, sys, time

LEVELS = {"ERROR": 40, "WARN": 30, "INFO": 20, "DEBUG": 10, "NONE": 100}

def _threshold() -> int:
    return LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), 20)

def _ts():
    return time.strftime("%H:%M:%S")

def log(level: str, msg: str):
    if LEVELS[level] >= _threshold():
        print(f"[{_ts()}][{level}] {msg}", file=sys.stdout if LEVELS[level] < 40 else sys.stderr)

def debug(msg): log("DEBUG", msg)
def info(msg):  log("INFO", msg)
def warn(msg):  log("WARN", msg)
def error(msg): log("ERROR", msg)


def _fmt(fields: dict) -> str:
    return " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)


class EventLogger:
    """Default sync observer: one log line per lifecycle stage."""

    FAILURE_STAGES = {"failed"}
    WARNING_STAGES = {"locate_failed"}

    def event(self, stage: str, **fields):
        line = f"[sync] {stage} {_fmt(fields)}".rstrip()
        if stage in self.FAILURE_STAGES:
            error(line)
        elif stage in self.WARNING_STAGES:
            warn(line)
        else:
            info(line)
