"""Scripted-dialogue control for a Pepper robot.

Modules:
  instructions  Say / move / say-and-move actions
  wire          JSON messages sent to the robot
  dispatch      send_instruction() over the robot's WebSocket
  store         Generic JSON file-backed record store
  sessions      Authored sessions and their assembly for playback
  moves         Motion library scanned from disk
  images        Uploaded image library
"""
