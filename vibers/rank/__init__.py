"""Coarse, learning-to-rank and final ranking stages."""