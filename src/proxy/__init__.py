"""HTTP proxy between the browser frontend and the users API."""
