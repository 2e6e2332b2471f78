"""Resonant OTA ladder filter with oversampling anti-aliasing filters."""