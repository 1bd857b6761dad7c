"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the event aggregation lives in services.
"""

import importlib

from config import get_settings_module

from src.donation_system.donation_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    for event in container.donation_service.list_events("fundraising"):
        print(f"{event.event_name}: {event.total_amount} / {event.target_amount} ({event.progress}%) {event.status.value}")


if __name__ == "__main__":
    main()
