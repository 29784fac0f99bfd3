"""Core: runtime, timers, configuración y dominio."""
