# Presence of this module enables App.Common.Router for the Common context.
