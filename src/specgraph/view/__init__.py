"""View state and render-record assembly."""
