"""Campus timetable query service with Microsoft sign-in."""
