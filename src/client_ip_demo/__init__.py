"""Client IP detection demo: four lookup methods and a middleware access gate."""
