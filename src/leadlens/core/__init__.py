"""Pure reporting logic: grouping, filtering, sorting, bucketing, export."""
