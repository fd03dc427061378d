"""Account-management backend: users, credentials, bearer tokens and categories."""
