# Personal Finance Services
