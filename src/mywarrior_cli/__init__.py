"""mywarrior - a command-line pomodoro tracker."""

__version__ = "0.1.0"
