"""Financial report endpoints for finreport.

Users list their report history page by page, configure whether monthly
reports are generated for them automatically, and generate a report on
demand over any date range. The ``from``/``to`` values of a generation
request are resolved leniently (see ``date_range``): missing or malformed
values fall back to the last 30 days and an inverted range is swapped.
All report handlers delegate to ``service``, which owns the aggregation
and persistence logic."""
