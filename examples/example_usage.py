"""Example: run the analytics engine over an in-memory store (no UI layer)."""

from workforce_analytics.analytics.date_range import DateRange
from workforce_analytics.container import build_container
from workforce_analytics.records.repository import InMemoryRecordStore


def main():
    store = InMemoryRecordStore(
        users=[
            {"id": "u1", "name": "Ana", "employeeId": "E-001", "branch": "North", "position": "Clerk", "role": "employee"},
            {"id": "u2", "name": "Ben", "employeeId": "E-002", "branch": "South", "position": "Driver", "role": "employee"},
        ],
        attendance=[
            {"id": "a1", "userId": "u1", "type": "check-in", "timestamp": {"seconds": 1767600000}},
            {"id": "a2", "userId": "u1", "type": "check-out", "timestamp": {"seconds": 1767630600}},
        ],
        tasks=[{"id": "t1", "userId": "u2", "title": "Restock", "status": "pending"}],
    )
    container = build_container(store=store)

    report, page = container.analytics_service.manager_report(DateRange.for_month("2026-01"))
    for row in page.items:
        print(row)
    print(report.rollup)


if __name__ == "__main__":
    main()
