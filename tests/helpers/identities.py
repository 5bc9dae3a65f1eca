"""Ledger identities shared by the test suite."""

ADMIN = "0xadmin"
EXCHANGE = "0xexchange"
REGULATOR = "0xregulator"
OUTSIDER = "0xoutsider"
