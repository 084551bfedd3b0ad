"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # External telemetry (SQLite path). Empty → demo mode, readings are simulated.
    TELEMETRY_DB: str = os.getenv("TELEMETRY_DB", "")

    # Dashboard + prediction refresh interval in milliseconds (5 min)
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "300000"))

    # Simulation (unset → fresh randomness on every call)
    SIMULATION_SEED: int | None = _optional_int("SIMULATION_SEED")

    # Classifier training
    TRAINING_DAYS: int = int(os.getenv("TRAINING_DAYS", "90"))
    TRAINING_EPOCHS: int = int(os.getenv("TRAINING_EPOCHS", "20"))
    BATCH_SIZE: int = int(os.getenv("BATCH_SIZE", "32"))
    VALIDATION_SPLIT: float = float(os.getenv("VALIDATION_SPLIT", "0.2"))
    LEARNING_RATE: float = float(os.getenv("LEARNING_RATE", "0.001"))


settings = Settings()
