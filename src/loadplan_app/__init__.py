"""Command line front end around the pallet assembly engine."""
