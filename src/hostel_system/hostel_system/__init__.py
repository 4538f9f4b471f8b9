"""Hostel management service.

Feature modules (users, rooms, finance, dining, attendance, ...) each carry a
frozen-dataclass model, a MySQL repository, a service and a thin Flask
controller; ``container`` wires them once per process.
"""
