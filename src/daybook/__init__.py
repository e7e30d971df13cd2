"""daybook - to-do list and weather CLI."""
