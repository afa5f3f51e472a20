"""
teleop package

Contains the topside control core: operator intent (control state), the
command diff engine, the wire codec, the serial command channel, the local
mirror of the vehicle and the per-frame control session.
This package has no GUI dependencies and is driven by the gui package.
"""
