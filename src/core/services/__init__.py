"""Servicios del Core: scripts que corren sobre el runtime."""
