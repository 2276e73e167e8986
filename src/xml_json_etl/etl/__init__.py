"""
XML -> JSON ETL: extract (parse markup), transform (infer JSON shape), load (write JSON).
"""
