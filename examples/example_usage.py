"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the same calls back the HTTP endpoints.
"""

import importlib

from config import get_settings_module

from src.hostel_system.hostel_system.container import build_container
from src.hostel_system.hostel_system.core.exceptions import NotFoundError


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    stats = container.dashboard_service.stats()
    print(f"{stats.occupied_seats}/{stats.total_capacity} seats taken ({stats.occupancy_rate}%)")

    for student in container.user_service.list_students():
        try:
            allocation = container.allocation_service.get_for_student(student.id)
        except NotFoundError:
            print(f"{student.name}: no seat")
            continue
        print(f"{student.name}: room #{allocation.room_id}, bed {allocation.bed_number}")


if __name__ == "__main__":
    main()
