"""Shared configuration for LaneDash."""
from pathlib import Path

# Directories
PROJECT_DIR = Path(__file__).parent
RESULTS_DIR = PROJECT_DIR / "results"

# Frame rate for the pygame and asyncio frame drivers
FPS = 60

# Obstacle placement seed for play, serve and simulate; None = fresh randomness each run
SEED = None

# Simulation settings
MAX_FRAMES = 12_000        # ~3 minutes at 60fps
SIMS_PER_POLICY = 20

# Web server
WEB_HOST = "127.0.0.1"
WEB_PORT = 8000

# File paths
SIM_RESULTS = RESULTS_DIR / "simulation.json"
