"""Users module: profiles, the profile store and role management."""
