"""
Utility helpers for fleetroute.

Components that are orthogonal to the routing engine but needed around it:

• Run time limits (`deadline.py`).
• Logging colour codes and progress bars (`logging.py`).
• Scenario loading (`data_loading.py`) and result export (`save_results.py`).
• Command-line parameter handling (`cli.py`).
"""
