"""
Effect engine - timers, frames and the single active effect scheduler
"""
