"""
Core application engine for reconciling the local cache with the manifest.

The `MirrorManager` drives a single pass, delegating the per-asset work and the
stale-file sweep to the `Reconciler`, which uses the `AssetResolver` to map
remote URLs onto cache paths.
"""
