"""Infrastructure: CDN client, services, persistence and security."""
