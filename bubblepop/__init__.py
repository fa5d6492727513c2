# Bubble Pop Source Package
"""
Bubble Pop - Simulation core for a hex-grid bubble shooter.

Modules:
- core: Abstract interfaces for games and renderers
- games: Game implementations (Bubble Shooter)
- utils: Configuration and logging
"""
