"""Threaded HTTP server streaming media files and skin remote QML files."""