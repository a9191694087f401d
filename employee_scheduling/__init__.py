"""Scoring rules and demo data for employee shift assignment.

Modules:
- domain: Employee, Shift and EmployeeSchedule models
- constraints: registry of hard and soft scoring rules
- scoring: hard/soft score aggregation and match explanations
- demo_data: deterministic demo instance generator
- random_source: pluggable seeded random sequences
- config: load and validate generator configuration (YAML or JSON)
- data_io: CSV loading and writing
- validator: integrity checks and text summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "constants",
    "domain",
    "constraints",
    "scoring",
    "demo_data",
    "random_source",
    "config",
    "data_io",
    "validator",
    "cli",
]
