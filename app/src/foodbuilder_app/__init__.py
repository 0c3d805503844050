"""FoodBuilder front-end: service wiring, the home view, and the runner."""
