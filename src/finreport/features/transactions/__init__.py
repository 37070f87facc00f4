"""Income and expense transactions: the raw data reports are generated from."""
