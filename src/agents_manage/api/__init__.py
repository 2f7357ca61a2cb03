"""HTTP API for managing projects, agent graphs and their resources."""
