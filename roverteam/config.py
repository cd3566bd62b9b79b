"""
Roverteam Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration loaded from environment variables."""

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    SCENARIOS_DIR: Path = Path(
        os.getenv("ROVERTEAM_SCENARIOS_DIR", str(PROJECT_ROOT / "examples" / "scenarios"))
    )
    DEFAULT_SCENARIO: str = os.getenv("ROVERTEAM_DEFAULT_SCENARIO", "mars_base")

    # Simulation Configuration
    # Delay a renderer should wait before showing the forced rotation after a collision.
    # The engine commits the rotation immediately; only the visual cue uses this.
    COLLISION_CUE_SECONDS: float = float(os.getenv("ROVERTEAM_COLLISION_CUE_SECONDS", "1.0"))

    # Logging
    VERBOSE: bool = _env_flag("ROVERTEAM_VERBOSE")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.COLLISION_CUE_SECONDS < 0:
            raise ValueError(
                "ROVERTEAM_COLLISION_CUE_SECONDS must be >= 0 "
                f"(got {cls.COLLISION_CUE_SECONDS})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Roverteam Configuration:",
            f"  Scenarios: {cls.SCENARIOS_DIR}",
            f"  Default Scenario: {cls.DEFAULT_SCENARIO}",
            f"  Collision Cue: {cls.COLLISION_CUE_SECONDS}s",
            f"  Verbose: {cls.VERBOSE}",
        ]
        return "\n".join(lines)
