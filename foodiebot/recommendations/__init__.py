"""
Place recommendation engine.

Responsibilities:
- Score places on rating, proximity, price and review volume.
- Infer a cuisine category for each place from its tags and name.
- Re-rank scored places for the time of day and the weather.
- Learn session preferences from the places a user selects.
"""
