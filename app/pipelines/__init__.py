"""Pipeline functions orchestrating services per endpoint."""
