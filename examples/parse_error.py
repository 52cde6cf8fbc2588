from ddl_ast import DDLParser

parser = DDLParser()
parser.parse("""
SET CURRENT SQLID = 'OWNER1';
CREATE SEQUENCE SEQ1 START WITH 1;
-- the sequence above is not supported and gets skipped
""")
for stmt in parser.statements:
    print(stmt)
for error in parser.errors:
    print(error, "caused by:", error.__cause__)
