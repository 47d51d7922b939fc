"""
UI Module
=========

Streamlit dashboard for the simulated power system:
- Overview (3D system view, status, trends)
- Power Flow
- Efficiency
- Weather
- EV Charging
"""
