"""
Rendering — everything between the catalogue and the pixels.

Modules:
    rendering.star_styling     — colour / size / alpha from magnitude + spectral type
    rendering.star_field       — visibility filter, star buffer, constellation lines
    rendering.update_scheduler — tick cadence + camera level of detail
    rendering.sinks            — render / HUD sink contracts
    rendering.sky_dome         — SkyDomeRenderer, drives the whole pipeline
    rendering.pygame_sink      — reference sink drawing an all-sky view with pygame

"""
