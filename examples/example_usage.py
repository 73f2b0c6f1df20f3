"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the schedule logic lives in the services.
"""

import importlib

from config import get_settings_module

from src.work_schedules.work_schedules.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    for day in container.schedule_resolver.resolve_week(1, "2024-01-01", "2024-01-07"):
        print(day.to_dict())


if __name__ == "__main__":
    main()
