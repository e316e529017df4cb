"""Cross-cutting helpers (logging, lazy client creation)."""
