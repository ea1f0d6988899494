# HTTP wrapper around the classifier service
