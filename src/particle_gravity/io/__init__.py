"""Scenario and units I/O."""

from .scenario import (  # noqa: F401
    ScenarioDefinition,
    load_scenario,
    new_default,
    save_scenario,
    scenario_to_runtime,
)
