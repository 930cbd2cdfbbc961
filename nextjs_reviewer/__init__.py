"""Static review of changed TypeScript/JavaScript files in a Next.js project."""

__version__ = "0.1.0"
