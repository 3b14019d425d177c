"""Services: git queries, draft generation, submission and the run pipeline."""
