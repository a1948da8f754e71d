"""Service layer: prompt construction and the API client facade."""
