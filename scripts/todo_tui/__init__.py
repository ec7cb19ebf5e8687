"""
Todo TUI - keyboard-driven terminal task tracker.

Architecture:
- models.py: Task / TaskStore records and the repository protocol
- controller.py: modal state machine (pure: state + event -> state + effect)
- keymap.py: Textual key names -> controller events
- storage.py: JSON file persistence
- views/: text projection and the Textual screen
- app.py: Main application entry point
"""
