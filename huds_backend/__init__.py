"""
HUDS menu backend.

Fetches Harvard University Dining Services menus daily, condenses them to
one canonical menu per serve date, stores them in MongoDB and serves them
over HTTP.

Structure:
- domain/: Menu models, condensation rules, errors and ports
- application/: Ingestion and query services
- infrastructure/: MongoDB, HUDS API client, cache, scheduler, config
- api/: HTTP routes
- tests/: Test suite (unit, api)
"""

__version__ = "1.0.0"
