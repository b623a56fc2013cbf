"""Core mirroring logic: configuration, diffing, manifests and the pipeline."""
