"""EcoTrack: daily eco task tracker."""
