"""HTTP routes: AI endpoints and health checks."""
