"""Service layer: execution orchestration, snippet history and editor sessions."""
