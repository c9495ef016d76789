"""Candidate recall strategies and their parallel combination."""