"""GitHub repository access: API client, rate limiting, tag and URL handling."""
