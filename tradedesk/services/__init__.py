"""Calculator, checklist, and workspace services."""
