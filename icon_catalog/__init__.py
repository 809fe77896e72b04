"""Icon catalog service: filtered queries over icons and sync from the inventory table."""
