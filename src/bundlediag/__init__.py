"""bundlediag: readable, source-mapped diagnostics for bundler build failures."""

__version__ = "0.1.0"
