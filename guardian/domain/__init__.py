"""Pure domain logic: request shapes, theft scoring and prompt rendering."""
