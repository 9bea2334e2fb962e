"""Web API for the SAR training tracker."""
