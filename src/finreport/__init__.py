"""finreport: personal-finance reporting API.

Stores income and expense transactions per user, generates summary reports
over a date range, and keeps the per-user settings that drive scheduled
monthly report generation."""
