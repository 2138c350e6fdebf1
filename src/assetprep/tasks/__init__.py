"""Asset preparation steps.

Each module declares one step with `@orchestrator.task(name=..., inputs=[...],
outputs=[...], gate=[...])`. Shared helpers live in `minify.py`.
"""
