"""
Exe Icon Extractor: pulls the embedded icon out of a Windows executable
and saves it as ICO, BMP, PNG or JPG
"""
