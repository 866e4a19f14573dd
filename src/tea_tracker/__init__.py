"""Office tea and snack consumption tracker."""
