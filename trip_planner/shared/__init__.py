"""
Shared infrastructure for the planner.

Modules:
- contracts: Pydantic models for plans, listings and saved trips
- errors: Error taxonomy (fatal vs. non-fatal)
- geo: Haversine distance and route label formatting
- llm: OpenAI client with retry logic
- logging: Structured JSON logging
- settings: Environment-backed configuration
"""

from trip_planner.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "setup_logging",
    "log_state_transition",
]
