# Personal Finance Schemas
