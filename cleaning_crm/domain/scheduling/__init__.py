"""
Scheduling Domain

Recurring cleaning jobs: expanding a client's standing schedule into job
instances, re-fitting future jobs onto a changed schedule and shifting
future jobs by a date delta.

Structure:
- constants.py        Weekdays, frequencies, statuses, pricing types
- errors.py           MissingConfiguration, NotFound, InvalidFormat, PartialWriteFailure
- time_calculator.py  Clock-time parsing, weekday and frequency arithmetic
- pricing.py          Charge, implied hourly rate, cleaner payout, profit
- planner.py          Pure planners: snapshot + request -> Plan
- executor.py         Applies a Plan with collect-and-continue semantics
- repository.py       SQLAlchemy record store returning snapshots
- service.py          Snapshot -> plan -> apply -> response
- router.py           FastAPI endpoints

Known limitation: concurrent requests for the same client are not
coordinated and may race; writes already applied are never rolled back.
"""
