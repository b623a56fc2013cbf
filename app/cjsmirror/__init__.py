"""cjsmirror - republish ES-module npm packages as CommonJS mirrors."""

__version__ = "0.1.0"
