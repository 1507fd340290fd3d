"""
Core plumbing.

Components:
- ports.py: Protocols (ByteStore, FetchObserver, LifecycleParticipant)
- lifecycle.py: LifecyclePhase + LifecycleMonitor
- identity.py: display_id / is_valid_id for anything with an id
- update_loop.py: the single update thread (asyncio loop in a background thread)
- state.py: AppState container
"""
