from ddl_ast import parse_ast
from ddl_ast.ast_nodes import CreateTable

statements = parse_ast("""
CREATE TABLE OWNER1.T1 (
  ID INTEGER NOT NULL,
  NAME VARCHAR(40) WITH DEFAULT 'none',
  CONSTRAINT PK_T1 PRIMARY KEY (ID)
) IN DB1.TS1;
""")
for stmt in statements:
    if isinstance(stmt, CreateTable):
        print(stmt.name, [str(f.name) for f in stmt.fields])
