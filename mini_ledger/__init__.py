"""Mini Ledger: accounts, fundings, withdrawals and transfers."""
