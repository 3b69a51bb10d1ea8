# analysis/__init__.py
# Plot helpers live in analysis.plots; importing it pulls in matplotlib.
