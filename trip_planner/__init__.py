"""Trip planner: trips, day-by-day timelines, packing lists and trip statistics."""
