"""Classic Snake: a fixed-tick grid simulation with a pygame touch/keyboard shell."""
