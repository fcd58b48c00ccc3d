"""Spot API sections: market data, account queries, request and response models."""