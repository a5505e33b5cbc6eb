INSERT_CUSTOMER = """
INSERT INTO customer (customer_id, company_name, country)
VALUES (:customer_id, :company_name, :country)
"""

CUSTOMER = """
SELECT customer_id, company_name, country
FROM customer
WHERE customer_id = :customer_id
"""

CUSTOMERS_BY_COUNTRY = """
SELECT customer_id, company_name, country
FROM customer
WHERE country = :country
ORDER BY customer_id
"""
